"""
phone_picker.reporting — Formatting and export of ranked recommendations.

Consumes engine output only; never re-ranks.

Modules:
  formatters — ASCII terminal report for Typer CLI commands.
  export     — JSON / CSV files for the top picks.
"""
