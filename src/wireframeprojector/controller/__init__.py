"""
The CONTROLLER layer drives the frame loop.
It talks to the GUI only through the scheduler and drawing-surface protocols.
"""
