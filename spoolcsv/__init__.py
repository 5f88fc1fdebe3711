"""`spoolcsv` converts Oracle-style spool text dumps into normalized CSV files."""

__version__ = "0.1.0"
