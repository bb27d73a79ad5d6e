"""Adapters connecting the Spine core to concrete infrastructure."""
