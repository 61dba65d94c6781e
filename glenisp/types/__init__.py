"""Value model and scope frames."""
