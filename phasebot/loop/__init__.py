"""
Fixed-period control loop module.

Drives components and autonomous modes at a fixed cadence and delivers the
enable and disable signals at mode boundaries.
"""
