"""Compute plugins shipped with cl_resize_tools."""
