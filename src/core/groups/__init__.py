"""Groups bounded context.

Group hierarchy, membership lifecycle, and the visibility and discussion
privacy rules that govern them.
"""
