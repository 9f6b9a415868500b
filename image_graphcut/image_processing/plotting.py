import matplotlib.pyplot as plt
import numpy as np


def plot_histograms(fg_histogram, bg_histogram, channel=0):
    """
    Plots the normalised foreground (blue) and background (red) histograms, marginalised on one channel.
    :return: the matplotlib figure
    """
    centers = (np.arange(fg_histogram.bins) + 0.5) * 255 / fg_histogram.bins
    width = 255 / fg_histogram.bins

    fig, axs = plt.subplots(1, 2, sharex=True, sharey=True)
    for ax, hist, color, title in [(axs[0], fg_histogram, "#0000ff88", "Foreground"),
                                   (axs[1], bg_histogram, "#ff000088", "Background")]:
        other_axes = tuple(i for i in range(hist.channels) if i != channel)
        values = np.sum(hist.normalized(), axis=other_axes) if other_axes else hist.normalized()
        ax.bar(centers, values, width=width, color=color)
        ax.set_title(title)
    return fig


def plot_terminal_weights(weights):
    """
    Displays the source and target weights of a Weights instance side by side
    :return: the matplotlib figure
    """
    fig, axs = plt.subplots(1, 2)
    for ax, w, title in [(axs[0], weights.w_if, "Source weights"), (axs[1], weights.w_ib, "Sink weights")]:
        # Seeds are left blank, their hard capacity would flatten the colour scale
        ax.imshow(np.where(w >= weights.hard_capacity, np.nan, w), cmap='gray')
        ax.set_title(title)
    return fig
