"""Tests for dataset loading, report frames and console rendering."""

import json

import pandas as pd
import pytest
from rich.console import Console

from sales_pipeline import analyze_sales_data
from sales_pipeline.errors import InvalidRecordError
from sales_pipeline.performance.models import SellerReport
from sales_pipeline.performance.report import (
    REPORT_COLUMNS,
    build_report_frame,
    format_top_products,
    render_report,
)
from sales_pipeline.utils.io import load_dataset, write_output

pytestmark = pytest.mark.unit


@pytest.fixture
def reports(raw_dataset, options):
    return analyze_sales_data(raw_dataset, options)


class TestLoadDataset:
    def test_json_file(self, tmp_path, raw_dataset):
        path = tmp_path / "data.json"
        path.write_text(json.dumps(raw_dataset), encoding="utf-8")
        assert load_dataset(path) == raw_dataset

    def test_directory(self, tmp_path, raw_dataset, options):
        pd.DataFrame(raw_dataset["sellers"]).to_csv(tmp_path / "sellers.csv", index=False)
        pd.DataFrame(raw_dataset["products"]).to_csv(tmp_path / "products.csv", index=False)
        (tmp_path / "purchase_records.json").write_text(json.dumps(raw_dataset["purchase_records"]))

        loaded = load_dataset(tmp_path)

        assert loaded["sellers"] == raw_dataset["sellers"]
        assert [p["sku"] for p in loaded["products"]] == ["P1", "P2", "P3", "P4"]
        assert analyze_sales_data(loaded, options) == analyze_sales_data(raw_dataset, options)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "data.xml"
        path.write_text("<data/>")
        with pytest.raises(ValueError, match="Unsupported dataset format"):
            load_dataset(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "nope.json")


class TestReportFrame:
    def test_columns_and_order(self, reports):
        frame = build_report_frame(reports)
        assert list(frame.columns) == REPORT_COLUMNS
        assert frame["rank"].tolist() == [1, 2, 3, 4, 5]
        assert frame["seller_id"].tolist() == ["s1", "s2", "s4", "s3", "s5"]
        assert frame.loc[0, "top_products"] == "P1×5, P2×2"

    def test_empty(self):
        assert build_report_frame([]).empty

    def test_unrounded_values_rejected(self):
        bad = SellerReport("a", "A B", revenue=1.234, profit=1.0, sales_count=1, bonus=0.0, top_products=())
        with pytest.raises(InvalidRecordError, match="revenue"):
            build_report_frame([bad])

    def test_quantity_projection(self):
        assert format_top_products(({"sku": "X", "quantity": 4},)) == "X×4"

    @pytest.mark.parametrize("fmt", ["csv", "json"])
    def test_write_output(self, tmp_path, reports, fmt):
        path = tmp_path / "out" / f"report.{fmt}"
        write_output(build_report_frame(reports), path, fmt)

        written = pd.read_csv(path) if fmt == "csv" else pd.read_json(path)
        assert written["profit"].tolist() == [70.0, 40.0, 25.0, 6.0, 2.0]

    @pytest.mark.parametrize(("fmt", "suffix", "engine", "read"), [
        ("parquet", "parquet", "pyarrow", pd.read_parquet),
        ("excel", "xlsx", "openpyxl", pd.read_excel),
    ])
    def test_write_output_binary_formats(self, tmp_path, reports, fmt, suffix, engine, read):
        pytest.importorskip(engine)
        path = tmp_path / f"report.{suffix}"
        write_output(build_report_frame(reports), path, fmt)

        written = read(path)
        assert written["seller_id"].tolist() == ["s1", "s2", "s4", "s3", "s5"]
        assert written["bonus"].tolist() == [15.75, 4.0, 3.75, 0.3, 0.0]

    def test_write_output_unknown_format(self, tmp_path, reports):
        with pytest.raises(ValueError, match="Unsupported output format"):
            write_output(build_report_frame(reports), tmp_path / "report.txt", "txt")


class TestRenderReport:
    def test_table(self, reports):
        console = Console(record=True, width=200)
        render_report(reports, console)
        text = console.export_text()
        assert "Seller Performance" in text
        assert "Anna Ivanova (s1)" in text
        assert "15.75" in text
        assert "5 sellers ranked" in text

    def test_no_sellers(self):
        console = Console(record=True, width=120)
        render_report([], console)
        assert "No sellers" in console.export_text()
