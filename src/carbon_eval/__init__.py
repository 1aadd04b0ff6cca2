from .constants import (
    CATEGORY_COLUMN,
    DEFAULT_EXPORT_FILENAME,
    EMISSION_FACTORS,
    EMISSIONS_COLUMN,
)
from .errors import (
    CarbonEvalError,
    EvaluationError,
    ExportWriteFailure,
    InvalidCategoryType,
    InvalidQuantity,
    MalformedInputError,
    UnknownCategory,
)
from .evaluator import (
    EvaluationEntry,
    EvaluationResult,
    FootprintEvaluator,
    coerce_pairs,
    evaluate,
)
from .plotting import plot_emissions, plot_result
from .writers import export_to_table, read_table

__all__ = [
    "CATEGORY_COLUMN",
    "DEFAULT_EXPORT_FILENAME",
    "EMISSIONS_COLUMN",
    "EMISSION_FACTORS",
    "CarbonEvalError",
    "EvaluationEntry",
    "EvaluationError",
    "EvaluationResult",
    "ExportWriteFailure",
    "FootprintEvaluator",
    "InvalidCategoryType",
    "InvalidQuantity",
    "MalformedInputError",
    "UnknownCategory",
    "coerce_pairs",
    "evaluate",
    "export_to_table",
    "plot_emissions",
    "plot_result",
    "read_table",
]
