"""Generate pydantic declarations from the Swagger 2.0 specification HTML."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup

from specgen.config_loader import load_generator_config
from specgen.parse.errors import SchemaExtractionError
from specgen.parse.models import GeneratorConfig, ObjectSection
from specgen.parse.section_walker import SectionWalker
from specgen.parse.tree import parse_document

from .emit_declarations import render_module
from .save_declarations import save_declarations


def parse_file(html_path: Path) -> BeautifulSoup:
    """Parse the Swagger 2.0 HTML page.

    Raises:
        FileNotFoundError: If html_path does not exist.
    """
    if not html_path.exists():
        raise FileNotFoundError(f"Specification file not found: {html_path}")
    with open(html_path, encoding="utf-8") as f:
        return parse_document(f.read())


def extract_sections(root: BeautifulSoup, config: GeneratorConfig) -> List[ObjectSection]:
    """Walk a parsed document into its object sections.

    Raises:
        SchemaExtractionError: If the catalogue anchor, a fixed fields table
            or one of its required columns is missing, or an object is
            declared twice.
    """
    walker = SectionWalker(
        root,
        special_types=config.special_types,
        anchor=config.anchor,
        comment_width=config.comment_width,
    )
    return walker.walk()


def generate_declarations(root: BeautifulSoup, config: Optional[GeneratorConfig] = None) -> str:
    """Walk a parsed document and render the declarations module."""
    config = config or load_generator_config()
    sections = extract_sections(root, config)
    return render_module(sections, config.special_types, config.field_comment_width)


def generate_file(
    html_path: Path,
    output_path: Path,
    config: Optional[GeneratorConfig] = None,
) -> Path:
    """Parse html_path and write the generated module to output_path.

    Nothing is written when extraction fails.
    """
    source = generate_declarations(parse_file(html_path), config)
    return save_declarations(source, output_path)


def main(argv=None) -> int:
    """Main entry point for generating declarations."""
    parser = argparse.ArgumentParser(
        description="Generate pydantic models from the Swagger 2.0 specification HTML"
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=Path("2.0.html"),
        help="Specification HTML file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("schema.py"),
        help="Generated Python module",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Generator config (default: config/special_types.yaml)",
    )

    args = parser.parse_args(argv)

    try:
        config = load_generator_config(args.config)
        print(f"Parsing: {args.input}")
        root = parse_file(args.input)
        sections = extract_sections(root, config)
        source = render_module(sections, config.special_types, config.field_comment_width)
        output_file = save_declarations(source, args.output)
    except (SchemaExtractionError, OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    classes = sum(1 for s in sections if not s.special)
    print(f"  Generated {classes} object(s) and {len(config.special_types)} special type(s)")
    print(f"  Saved to: {output_file}")
    print("\n[OK] Generation complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
