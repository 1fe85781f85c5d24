"""CSV logger for training metrics and configuration."""

import csv
from datetime import datetime
from pathlib import Path


class CSVLogger:
    """Logger for writing training metrics to CSV file."""

    def __init__(self, log_path, config):
        """
        Initialize CSV logger.

        Args:
            log_path: Path to CSV file
            config: Training configuration object
        """
        self.log_path = Path(log_path)
        self.config = config
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        self.file_exists = self.log_path.exists()
        self.columns = self._get_columns()

        # Header is written once per file
        if not self.file_exists:
            self._write_header()

    def _get_columns(self):
        """Define all columns for the CSV file."""
        return [
            # Timestamp and identification
            'timestamp',
            'epoch',

            # Training metrics
            'train_loss',
            'train_acc',

            # Optimization
            'learning_rate',

            # Network architecture
            'num_inputs',
            'num_hidden_nodes',
            'num_outputs',

            # Data
            'dataset',
            'num_training_sets',
            'seed',

            # Timing
            'epoch_time_seconds',
            'cumulative_time_seconds',
        ]

    def _write_header(self):
        with open(self.log_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=self.columns)
            writer.writeheader()

    def log(self, metrics):
        """
        Log metrics to CSV file.

        Args:
            metrics: Dictionary of metrics to log
        """
        if 'timestamp' not in metrics:
            metrics['timestamp'] = datetime.now().strftime('%Y-%m-%d %H:%M:%S')

        for key, value in self._get_config_params().items():
            if key not in metrics:
                metrics[key] = value

        # Missing columns are written as empty strings
        row = {col: metrics.get(col, '') for col in self.columns}

        with open(self.log_path, 'a', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=self.columns)
            writer.writerow(row)

    def _get_config_params(self):
        """Extract relevant parameters from config."""
        params = {}
        for name in ('num_inputs', 'num_hidden_nodes', 'num_outputs',
                     'learning_rate', 'dataset', 'seed'):
            value = getattr(self.config, name, None)
            if value is not None:
                params[name] = value
        return params

    def log_epoch(self, epoch, metrics):
        """
        Convenience method to log an epoch with standard metrics.

        Args:
            epoch: Epoch number
            metrics: Dictionary of metrics
        """
        metrics['epoch'] = epoch
        self.log(metrics)
