"""Chat agent: model backbone, tool loop and message aggregation."""
