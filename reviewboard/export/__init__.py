"""Report exporters."""
