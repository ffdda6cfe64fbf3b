"""Default name lists shipped with cmdlint."""
