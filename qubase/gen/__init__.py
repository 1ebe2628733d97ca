"""Generate specific or random quantum states and operators.
"""
