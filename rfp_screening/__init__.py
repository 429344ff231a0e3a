"""RFP bid screening — GO / NO-GO scoring of RFPs against a company profile."""

__version__ = "0.1.0"
