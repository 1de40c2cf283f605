"""
추첨 이력 분석 모듈

이 패키지는 추첨 이력에서 번호별 통계를 계산하는 기능을 제공합니다.
"""

from .statistical_analyzer import StatisticalAnalyzer, dominant_odd_count, spread

__all__ = ['StatisticalAnalyzer', 'dominant_odd_count', 'spread']
