"""
Collection engine: selection, keyboard navigation, layout/virtualization
and the sort/filter pipeline.
"""
