"""Chat module - questions, summaries and clearing."""
