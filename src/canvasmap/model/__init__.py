"""
The MODEL layer contains pure data structures and math.
It has NO knowledge of the GUI (Qt) or of the drawing surface.
It deals with angles, points, bounds and grid divisions.
"""
