"""Domain records for pain, exercise, issue and reminder tracking."""
