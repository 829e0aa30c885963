"""
Cartfold CLI - Event-sourced shopping cart replay

Commands:
- cartfold replay - Replay an event file into a cart
- cartfold events - List decoded events
- cartfold version - Show version information
"""

__version__ = "0.1.0"
