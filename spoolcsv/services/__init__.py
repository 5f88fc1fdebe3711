"""Service packages for spoolcsv."""
