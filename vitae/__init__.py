"""
VITAE - Versioned Itinerary To ATS-ready Exports

Generates a personal résumé website and a matching ATS-optimized PDF from a
single structured JSON data file.

Architecture:
- Intake Context: Résumé data file loading
- Templating Context: Typed résumé model and HTML/manifest rendering
- Rendering Context: Headless-browser PDF printing
- Building Context: Asset staging, build pipeline, rebuild coordination, dev server
"""

__version__ = "0.1.0"
