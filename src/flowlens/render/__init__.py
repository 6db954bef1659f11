"""Scene rendering: SVG, HTML page, labels, viewport and panels."""
