"""
docs_to_pdf package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# The CLI lives in the `docs_to_pdf.cli` submodule (entry point: docs_to_pdf.cli:cli).
# It is not re-exported here: binding the name `cli` on the package would shadow
# the submodule, so `import docs_to_pdf.cli` would return the click group.

__all__ = ["__version__"]
