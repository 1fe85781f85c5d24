"""Epoch loop with progress, evaluation and CSV logging for a Network."""

import os
import time

from tqdm import tqdm

from relunet.utils.csv_logger import CSVLogger


class Trainer:
    """Drives Network.train one epoch at a time and records metrics."""

    def __init__(self, network, config, log_dir=None):
        """
        Args:
            network: Network with training data already loaded
            config: Training configuration (num_epochs, learning_rate, log_every, ...)
            log_dir: Directory for the CSV log (default: config.log_dir, None disables)
        """
        self.network = network
        self.config = config
        self.num_epochs = config.num_epochs
        self.learning_rate = config.learning_rate
        self.log_every = max(1, getattr(config, 'log_every', 100))
        self.show_progress = getattr(config, 'show_progress', True)
        self.current_epoch = 0

        # Timing
        self.cumulative_time = 0.0

        # Initialize CSV logger
        log_dir = log_dir if log_dir is not None else getattr(config, 'log_dir', None)
        self.csv_logger = None
        self.csv_path = None
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            timestamp = time.strftime('%Y%m%d_%H%M%S')
            self.csv_path = os.path.join(log_dir, f'training_log_{timestamp}.csv')
            self.csv_logger = CSVLogger(self.csv_path, config)
            print(f"CSV logging enabled: {self.csv_path}")

    def train_epoch(self):
        """
        Run a single epoch.

        Returns:
            loss: MSE over the training data after the epoch
        """
        self.network.train(1, self.learning_rate)
        self.current_epoch += 1
        mse, _ = self.network.evaluate()
        return mse['metric']

    def train(self):
        """
        Full training loop.

        Returns:
            history: Dictionary with per-epoch losses and periodic accuracy
        """
        if self.network.num_training_sets() == 0:
            raise ValueError("No training data loaded; call set_training_data first.")

        print(f"\nStarting training for {self.num_epochs} epochs")
        print(f"Network: {self.network.num_inputs()}-{self.network.num_hidden_nodes()}-"
              f"{self.network.num_outputs()}, learning rate {self.learning_rate}")
        print(f"Training sets: {self.network.num_training_sets()}")

        initial_mse, initial_acc = self.network.evaluate()
        print(f"Initial: loss={initial_mse['metric']:.6f} | acc={initial_acc['metric']:6.2f}%")
        print()

        loss_hist = []
        acc_hist = []
        epoch_marks = []

        progress = tqdm(range(1, self.num_epochs + 1), desc="Training",
                        disable=not self.show_progress)
        for epoch in progress:
            epoch_start_time = time.time()
            train_loss = self.train_epoch()
            loss_hist.append(train_loss)

            epoch_time = time.time() - epoch_start_time
            self.cumulative_time += epoch_time

            if epoch % self.log_every == 0 or epoch == self.num_epochs:
                _, acc = self.network.evaluate()
                acc_hist.append(acc['metric'])
                epoch_marks.append(epoch)
                progress.set_postfix(loss=f"{train_loss:.4f}", acc=f"{acc['metric']:.1f}%")

                if self.csv_logger:
                    self.csv_logger.log_epoch(epoch, {
                        'train_loss': train_loss,
                        'train_acc': acc['metric'],
                        'learning_rate': self.learning_rate,
                        'num_inputs': self.network.num_inputs(),
                        'num_hidden_nodes': self.network.num_hidden_nodes(),
                        'num_outputs': self.network.num_outputs(),
                        'num_training_sets': self.network.num_training_sets(),
                        'epoch_time_seconds': epoch_time,
                        'cumulative_time_seconds': self.cumulative_time,
                    })

        final_mse, final_acc = self.network.evaluate()
        print("--- Final Evaluation ---")
        print(f"Final: loss={final_mse['metric']:.6f} | acc={final_acc['metric']:.2f}% "
              f"({final_acc['correct']}/{final_acc['total']})")
        print()

        return {
            'loss_hist': loss_hist,
            'acc_hist': acc_hist,
            'epoch_marks': epoch_marks,
            'initial_scores': {'mse': initial_mse, 'acc': initial_acc},
            'final_scores': {'mse': final_mse, 'acc': final_acc},
            'csv_path': self.csv_path,
        }
