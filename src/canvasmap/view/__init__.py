"""
The VIEW layer hosts the map in Qt widgets.
It converts Qt events into the controller's input calls and shows the frames.
"""
