"""酒店评价服务"""
__version__ = "1.0.0"
