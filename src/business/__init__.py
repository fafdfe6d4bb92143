"""
Business Layer - 业务模块层

Odin.fun 交易机器人的业务逻辑层，包含：
- trading: 决策引擎、交易流水线、交易机器人
- cli: 命令行工具
"""
