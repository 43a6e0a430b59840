"""Sales performance report: per-seller revenue, profit, bonus and top products."""

from sales_pipeline.config import ReportConfig, load_report_config
from sales_pipeline.errors import (
    BonusIndexError,
    EmptyCollectionError,
    FieldTypeError,
    InvalidRecordError,
    MissingStrategyError,
    SalesPipelineError,
    ShapeError,
    ValidationError,
)
from sales_pipeline.performance import analyze_sales_data
from sales_pipeline.performance.strategies import (
    AnalysisOptions,
    FlatRateBonus,
    ProfitBandBonus,
    calculate_bonus_by_profit,
    calculate_simple_revenue,
    default_options,
)
