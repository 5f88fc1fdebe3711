"""Core building blocks shared by the spoolcsv services."""
