"""
Heart-disease analysis utilities.
Load, clean and encode the fixed-schema dataset, explore it, and compare
logistic regression, SVM and random forest on a stratified split.
"""

from .config import AnalysisConfig, CleaningConfig, ModelMetrics, calculate_split_percentages, validate_analysis_config
from .loader import read_dataset
from .preprocessing import clean_dataset, decode_categories, encode_category
from .splitting import Split, split_dataset
from .evaluation import ConfusionCounts, tabulate_confusion, compute_metrics
from .reporting import build_comparison_table, format_comparison_table, comparison_table_to_csv
from .eda import perform_eda, summarize_dataset, correlation_long
from .models import ModelComparer
from .utils import safe_json_convert, validate_file_upload

__all__ = [
    'AnalysisConfig',
    'CleaningConfig',
    'ModelMetrics',
    'calculate_split_percentages',
    'validate_analysis_config',
    'read_dataset',
    'clean_dataset',
    'decode_categories',
    'encode_category',
    'Split',
    'split_dataset',
    'ConfusionCounts',
    'tabulate_confusion',
    'compute_metrics',
    'build_comparison_table',
    'format_comparison_table',
    'comparison_table_to_csv',
    'perform_eda',
    'summarize_dataset',
    'correlation_long',
    'ModelComparer',
    'safe_json_convert',
    'validate_file_upload',
]
