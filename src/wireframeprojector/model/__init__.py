"""
The MODEL layer contains pure data structures and the geometry pipeline.
It has NO knowledge of the GUI (Qt).
It deals with Geometry, Motion, Projection and Viewport math.
"""
