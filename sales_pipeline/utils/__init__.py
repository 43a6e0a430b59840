"""Shared utilities for the sales pipeline."""

from sales_pipeline.utils.io import load_dataset, write_output
from sales_pipeline.utils.transforms import is_number, round_money
from sales_pipeline.utils.validators import check_frame
