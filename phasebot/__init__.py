"""
Phasebot - Timed State Machines for Fixed-Period Control Loops

Sequences time-bounded behavioral phases inside a periodic control loop,
such as an autonomous robot routine. States are declared in an explicit
table, validated once, and executed one tick at a time.
"""

__version__ = "0.1.0"
__author__ = "Phasebot Team"
