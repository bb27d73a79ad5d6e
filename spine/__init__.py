"""Spine: lower-back pain and exercise tracking core.

This package contains the record models and the analytics services that
turn time-stamped pain and exercise records into statistics, trends,
calendar overlays and plain-text reports.
"""
