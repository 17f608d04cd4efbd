"""Write the generated declarations module to disk."""

from pathlib import Path


def save_declarations(source: str, output_path: Path) -> Path:
    """Write generated module text to output_path.

    Args:
        source: Rendered module text
        output_path: Destination .py file; parent directories are created

    Returns:
        Path to the written file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(source)
    return output_path
