"""
Utilities around the hex graticule core.

- config_loader.py: config.yaml access and graticule construction
- render_graticule.py: top-down PNG rendering of a populated graticule
"""
