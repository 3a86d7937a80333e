"""Binding layer: record field tables, default request capabilities, and the binder."""
