"""Indicator-of-compromise extraction helpers."""

from .extractor import INDICATOR_KINDS, IocExtractor, IocReport, IocScan, refang

__all__ = ["INDICATOR_KINDS", "IocExtractor", "IocReport", "IocScan", "refang"]
