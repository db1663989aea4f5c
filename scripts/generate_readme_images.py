"""Generate static images for README from a saved learning curve result."""

from __future__ import annotations

from pathlib import Path

from learning_curve_core.plotting import plot_learning_curve
from learning_curve_core.result_io import load_result

OUTPUT_DIR = Path("docs/images")
RESULT_JSON = Path("results/demo/learning_curve_demo.json")


def generate_images(result_path: Path, output_dir: Path) -> None:
    """Write the measure-faceted and learner-faceted charts as PNG files."""
    result = load_result(result_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    for facet in ("measure", "learner"):
        fig = plot_learning_curve(result, facet=facet)
        fig.update_layout(
            width=1100,
            margin=dict(l=60, r=30, t=80, b=60),
            font=dict(size=13),
        )
        output_path = output_dir / f"learning-curve-by-{facet}.png"
        fig.write_image(str(output_path), scale=2)
        print(f"  Generated: {output_path}")


def main() -> None:
    print("Generating README images from demo data...")
    generate_images(RESULT_JSON, OUTPUT_DIR)
    print("Done!")


if __name__ == "__main__":
    main()
