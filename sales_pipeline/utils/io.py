"""File I/O for loading sales datasets and writing report output."""

import json
from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path
type RawDataset = dict[str, list[dict]]

console = Console()

SELLERS_FILE = "sellers.csv"
PRODUCTS_FILE = "products.csv"
PURCHASES_FILE = "purchase_records.json"


def _read_json(path: Path) -> object:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _load_dataset_directory(directory: Path) -> RawDataset:
    """Sellers and products from CSV, purchase records (nested items) from JSON."""
    sellers = pd.read_csv(directory / SELLERS_FILE, dtype=str, keep_default_na=False)
    products = pd.read_csv(directory / PRODUCTS_FILE, dtype={"sku": str, "name": str})

    console.print(f"  Read {len(sellers)} sellers and {len(products)} products from {directory}")
    return {
        "sellers": sellers.to_dict("records"),
        "products": products.to_dict("records"),
        "purchase_records": _read_json(directory / PURCHASES_FILE),
    }


def load_dataset(path: FilePath) -> object:
    """Load a raw dataset from a JSON file or a directory of source files.

    Returns the raw structure as read; shape checks happen in validation.
    """
    path = Path(path)
    if path.is_dir():
        return _load_dataset_directory(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    match path.suffix:
        case ".json":
            return _read_json(path)
        case ext:
            raise ValueError(f"Unsupported dataset format: {ext or path.name}")


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> None:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "parquet":
            df.to_parquet(path, index=False)
        case "excel":
            df.to_excel(path, index=False, engine="openpyxl")
        case "json":
            df.to_json(path, orient="records", indent=2)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
