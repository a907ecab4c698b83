"""Rendering subpackage.

Turns decoded character buckets into drawable layer lists:

* :mod:`character_render.renderer.cache` memoizes the filtered layer tuple
  for each resolved visual state.
* :mod:`character_render.renderer.drawable` provides the default drawable
  handle and Pillow based compositing of an ordered layer list.
"""
