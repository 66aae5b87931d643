from subtitle_checker.analysis.analyzer import Analyzer, MissingCredentialsAnalyzer
from subtitle_checker.analysis.base import BaseAnalyzer
from subtitle_checker.analysis.factory import AnalyzerFactory

__all__ = ["Analyzer", "AnalyzerFactory", "BaseAnalyzer", "MissingCredentialsAnalyzer"]
