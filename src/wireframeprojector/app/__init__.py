"""
The APP layer: Qt widgets, the frame scheduler and the drawing canvas.
"""
