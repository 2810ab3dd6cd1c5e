"""calcpad: keypad calculator core.

Turns a stream of key presses (digits, decimal point, operators, equals,
clears, memory keys) into a result, keeping a display-ready string at every
step. Operators are queued and the whole expression is evaluated with
standard precedence when equals is pressed.

Usage:
    python -m calcpad eval 2 + 3 x 4 =      # 14
    python -m calcpad repl                  # Interactive keypad
    python -m calcpad history               # Past calculations
"""
