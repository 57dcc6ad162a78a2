"""Mentor-mentee matching service: directory, match request lifecycle and feedback."""
