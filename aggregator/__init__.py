"""
策略聚合系统

把多个独立子策略的买卖信号按权重民主投票，合成一个决策。
"""
