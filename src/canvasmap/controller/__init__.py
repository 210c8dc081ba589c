"""
The CONTROLLER layer turns normalized input events into camera and element
operations and drives the frame (clear -> grid -> elements).
"""
