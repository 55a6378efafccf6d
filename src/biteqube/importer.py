"""Bulk import of recipe CSV exports into the recipes table."""

import argparse
import csv
import logging
import pathlib
import sys
from collections.abc import Iterator
from dataclasses import dataclass

from supabase import create_client

from biteqube.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from biteqube.app_logging import configure_logging
from biteqube.config import Settings
from biteqube.services.recipes import RecipeRepository, parse_int

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


@dataclass(frozen=True)
class ImportSummary:
    total: int
    imported: int
    failed: int


def row_from_record(record: dict[str, str]) -> dict[str, object]:
    """Map one CSV record onto a recipes table row."""
    return {
        "recipe_name": _first(record, "TranslatedRecipeName", "RecipeName")
        or "Unnamed Recipe",
        "ingredients": _first(record, "TranslatedIngredients", "Ingredients") or "",
        "instructions": _first(record, "TranslatedInstructions", "Instructions")
        or "",
        "cuisine": _first(record, "Cuisine") or "Unknown",
        "total_time_mins": parse_int(record.get("TotalTimeInMins")),
        "ingredient_count": parse_int(record.get("Ingredient-count")),
        "image_url": _first(record, "image-url", "ImageURL"),
        "source_url": _first(record, "URL"),
    }


def read_records(path: pathlib.Path) -> list[dict[str, str]]:
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        return [
            {key.strip(): (value or "").strip() for key, value in record.items() if key}
            for record in reader
            if any((value or "").strip() for value in record.values())
        ]


def import_records(
    records: list[dict[str, str]],
    repository: RecipeRepository,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> ImportSummary:
    """Insert records in batches; a failed batch is counted and skipped."""
    if batch_size < 1:
        raise ValueError("batch_size must be positive")
    imported = 0
    failed = 0
    for number, batch in enumerate(_batches(records, batch_size), start=1):
        rows = [row_from_record(record) for record in batch]
        try:
            repository.insert_recipes(rows)
        except Exception:
            logger.exception(
                "Error inserting recipe batch",
                extra={"batch": number, "rows": len(rows)},
            )
            failed += len(rows)
            continue
        imported += len(rows)
        logger.info("Imported batch %s (%s/%s)", number, imported, len(records))
    return ImportSummary(total=len(records), imported=imported, failed=failed)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import recipes from a CSV file")
    parser.add_argument("csv_path", nargs="?", default="recipes.csv")
    parser.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE)
    args = parser.parse_args(argv)

    path = pathlib.Path(args.csv_path)
    if not path.exists():
        print(f"{path} not found", file=sys.stderr)
        return 1

    settings = Settings()
    configure_logging(settings.environment)
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    records = read_records(path)
    print(f"Found {len(records)} recipes in {path}")
    summary = import_records(
        records, SupabaseRecipeRepository(client), batch_size=args.batch_size
    )
    print(f"Successfully imported: {summary.imported} recipes")
    if summary.failed:
        print(f"Failed to import: {summary.failed} recipes")
    return 0


def _batches(
    records: list[dict[str, str]], size: int
) -> Iterator[list[dict[str, str]]]:
    for start in range(0, len(records), size):
        yield records[start : start + size]


def _first(record: dict[str, str], *keys: str) -> str | None:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


if __name__ == "__main__":
    raise SystemExit(main())
