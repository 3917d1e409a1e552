"""
fincontrol - Personal Finance Tracker Core

Records income and expense transactions, groups them into categories,
and computes the monthly figures a dashboard needs.

DESIGN PRINCIPLES:
1. The data store owns the dataset; nothing else writes to it
2. Metrics are pure functions over whatever the caller hands them
3. Only paid transactions count towards realized figures
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "fincontrol Team"
