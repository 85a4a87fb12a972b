"""Declarative area chart composition.

Charts are driven by `AreaChartConfig` objects rather than bespoke view
logic. This package contains the schema, validation, composition and
interaction utilities used by the chart views. It does not import Django.
"""
