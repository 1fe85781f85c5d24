"""Base configuration for all networks."""

class BaseConfig:
    """Shared configuration across all networks."""

    # Reproducibility
    seed = None            # None: fresh entropy on every run

    # Training
    num_epochs = 1000
    learning_rate = 0.02
    log_every = 100        # Evaluate and write a CSV row every N epochs

    # Printing
    num_decimals = 1
    print_threshold = 0.001  # Values strictly inside (-t, t) print as 0
    show_progress = True     # tqdm progress bar over epochs

    # Paths
    log_dir = "logs"
    output_dir = "outputs"
