"""
Targeted resource scanner: visit a product's known pages, bucket their links,
and attach teacher-facing insights.
"""

from .classify import CATEGORIES, determine_category, derive_title, is_protection_page, is_skippable, resource_type
from .extract import PageData
from .insights import InsightGenerator, default_insights, default_resource_analysis
from .scanner import DeepResource, ScanMetadata, ScanResult, TargetedScanner

__all__ = [
    "CATEGORIES",
    "DeepResource",
    "InsightGenerator",
    "PageData",
    "ScanMetadata",
    "ScanResult",
    "TargetedScanner",
    "default_insights",
    "default_resource_analysis",
    "derive_title",
    "determine_category",
    "is_protection_page",
    "is_skippable",
    "resource_type",
]
