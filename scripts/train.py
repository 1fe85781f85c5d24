#!/usr/bin/env python
"""
Training script for the two-layer ReLU network.

Usage:
    python scripts/train.py
    python scripts/train.py --dataset and --epochs 2000 --seed 0
    python scripts/train.py --hidden 4 --lr 0.05 --plot
    python scripts/train.py --config my_config.py
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

import argparse

from config.xor_config import XorConfig
from relunet.data.dataset import logic_gate_dataset, GATE_OUTPUTS
from relunet.models.ann.network import Network
from relunet.training.trainer import Trainer
from relunet.utils.visualization import plot_training_curves


def main():
    """Main training function."""
    parser = argparse.ArgumentParser(description='Train a two-layer ReLU network')
    parser.add_argument('--config', type=str, default=None, help='Path to custom config')
    parser.add_argument('--dataset', type=str, default=None, choices=sorted(GATE_OUTPUTS),
                        help='Logic gate to learn')
    parser.add_argument('--epochs', type=int, default=None, help='Number of epochs')
    parser.add_argument('--lr', type=float, default=None, help='Learning rate')
    parser.add_argument('--hidden', type=int, default=None, help='Number of hidden nodes')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--decimals', type=int, default=None, help='Decimals when printing')
    parser.add_argument('--plot', action='store_true', help='Save loss/accuracy curves')
    parser.add_argument('--quiet', action='store_true', help='Disable the progress bar')
    args = parser.parse_args()

    # Load configuration
    if args.config:
        import importlib.util
        spec = importlib.util.spec_from_file_location("config", args.config)
        config_module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(config_module)
        config = config_module.XorConfig()
    else:
        config = XorConfig()

    # Command line overrides
    if args.dataset is not None:
        config.dataset = args.dataset
    if args.epochs is not None:
        if args.epochs < 0:
            parser.error('--epochs must be >= 0')
        config.num_epochs = args.epochs
    if args.lr is not None:
        config.learning_rate = args.lr
    if args.hidden is not None:
        if args.hidden < 1:
            parser.error('--hidden must be >= 1')
        config.num_hidden_nodes = args.hidden
    if args.seed is not None:
        config.seed = args.seed
    if args.decimals is not None:
        config.num_decimals = args.decimals
    if args.quiet:
        config.show_progress = False

    print("=" * 60)
    print(f"ReLU Network Training ({config.dataset.upper()})")
    print("=" * 60)
    print(f"Config: inputs={config.num_inputs}, hidden={config.num_hidden_nodes}, "
          f"outputs={config.num_outputs}, seed={config.seed}")
    print(f"Epochs: {config.num_epochs}, Learning rate: {config.learning_rate}")

    train_in, train_out = logic_gate_dataset(config.dataset)

    network = Network(config.num_inputs, config.num_hidden_nodes, config.num_outputs,
                      seed=config.seed)
    network.set_training_data(train_in, train_out)

    trainer = Trainer(network, config)
    history = trainer.train()

    network.render(decimals=config.num_decimals, threshold=config.print_threshold)

    if args.plot:
        plot_path = os.path.join(config.output_dir, f"{config.dataset}_training.png")
        plot_training_curves(history, plot_path, label=config.dataset)
        print(f"Training curves saved to {plot_path}")


if __name__ == "__main__":
    main()
