"""ROI tracking engine for automation/AI initiatives."""
