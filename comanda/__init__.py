"""Building blocks for YAML-defined model pipelines: steps, inputs, scraping, progress, outputs and data-directory file management."""

__version__ = "0.1.0"