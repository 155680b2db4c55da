"""NiceGUI interface - thin visualization layer for the conversation.

Responsibilities:
    - Message list display with tables and Plotly charts
    - Loading indicator with elapsed time
    - Query history panel and arrow-key recall
    - Optional bulk "Process Queries" action

Contains no conversation logic. Re-renders on controller change notifications.
"""
