from .analysis import AnalysisResult, analyze, load_bsp
from .entities import EntityStats
from .lumps import BSPHeaderError

__all__ = ['AnalysisResult', 'BSPHeaderError', 'EntityStats', 'analyze', 'load_bsp']
