"""
==============================================================================
API Package
==============================================================================

HTTP routers for the visualizer service.

==============================================================================
"""
