from pathlib import Path

HAS_MPL = False
try:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    HAS_MPL = True
except ImportError:
    HAS_MPL = False


def plot_profile(outdir: Path, name: str, meta: dict) -> None:
    """Node temperature against height for one zone summary."""
    if not HAS_MPL or "node_temperatures_C" not in meta:
        return
    outdir.mkdir(parents=True, exist_ok=True)
    temps = meta["node_temperatures_C"]
    pts = sorted(
        (n["height_m"], temps[n["name"]], n["name"])
        for n in meta["nodes"]
        if n["role"] != "supply"
    )

    fig, ax = plt.subplots(figsize=(6, 7))
    ax.plot([p[1] for p in pts], [p[0] for p in pts], "o-", lw=2)
    for h, t, label in pts:
        ax.annotate(label, (t, h), textcoords="offset points", xytext=(6, 0), fontsize=8)
    prof = meta.get("profile", {})
    ax.set(
        xlabel="T, °C",
        ylabel="height, m",
        title=f"{name}: slope {prof.get('slope_K_m', float('nan')):.3f} K/m",
    )
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(outdir / f"{name}_profile.png", dpi=200)
    plt.close(fig)
