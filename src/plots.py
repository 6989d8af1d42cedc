import matplotlib.pyplot as plt
import numpy as np

def plot_results(log):
    t = np.array(log["t"])
    mag = np.array(log["magnitude"])
    live = np.array(log["live_gusts"])
    dx = np.array(log["dir_x"])
    dy = np.array(log["dir_y"])
    dz = np.array(log["dir_z"])
    tilt = np.array(log["tilt_deg"])
    enabled = np.array(log["enabled"], dtype=float)

    plt.figure()
    plt.plot(t, mag, label="overlay magnitude")
    plt.fill_between(t, 0, mag.max(initial=0.0) * (1.0 - enabled), alpha=0.15, label="wind off")
    plt.xlabel("t (s)")
    plt.ylabel("gravity power overlay")
    plt.title("Aggregate wind force")
    plt.legend()
    plt.grid(True)

    plt.figure()
    plt.step(t, live, where="post")
    plt.xlabel("t (s)")
    plt.title("Live gusts")
    plt.grid(True)

    plt.figure()
    plt.plot(t, dx, label="x")
    plt.plot(t, dy, label="y")
    plt.plot(t, dz, label="z")
    plt.xlabel("t (s)")
    plt.title("Gravity direction (first joint)")
    plt.legend()
    plt.grid(True)

    plt.figure()
    plt.plot(t, tilt)
    plt.xlabel("t (s)")
    plt.ylabel("deg")
    plt.title("Tilt from baseline (first joint)")
    plt.grid(True)

    plt.show()
