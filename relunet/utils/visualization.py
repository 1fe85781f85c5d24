"""Training curve plots."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def plot_training_curves(history, save_path, label="relunet"):
    """
    Plot loss per epoch and accuracy at the logged epochs side by side.

    Args:
        history: Dictionary returned by Trainer.train
        save_path: Where to write the PNG
        label: Legend / title label

    Returns:
        fig: Matplotlib figure
    """
    loss_hist = history["loss_hist"]
    acc_hist = history.get("acc_hist", [])
    epoch_marks = history.get("epoch_marks", [])

    fig, ax = plt.subplots(1, 2, figsize=(11, 4.5))
    ax[0].plot(range(1, len(loss_hist) + 1), loss_hist, label=label)
    ax[0].set_title(f"[{label}] Training Loss (MSE)")
    ax[0].set_xlabel("Epoch"); ax[0].set_ylabel("Loss"); ax[0].legend()

    if acc_hist:
        ax[1].plot(epoch_marks, acc_hist, marker=".", linestyle="-", label=label)
        ax[1].set_title(f"[{label}] Accuracy")
        ax[1].set_xlabel("Epoch"); ax[1].set_ylabel("Accuracy (%)"); ax[1].legend()
    else:
        ax[1].text(0.5, 0.5, f"[{label}] Accuracy snapshots unavailable",
                   ha="center", va="center", transform=ax[1].transAxes)
        ax[1].set_axis_off()

    plt.tight_layout()
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    return fig
