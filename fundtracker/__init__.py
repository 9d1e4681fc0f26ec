"""
Fund Tracker - Source Package

A small, single-user tool that tracks contributions toward a savings
target and celebrates funding milestones with confetti.

DESIGN PRINCIPLES:
1. The ledger is the only source of truth; everything else is derived
2. Every milestone crossed by an addition is reported, in order
3. Invalid input never mutates state
4. Every user action is auditable
5. Storage, notifications and rendering are swappable collaborators
"""

__version__ = "1.0.0"
__author__ = "Fund Tracker Team"
