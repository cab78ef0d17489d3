"""Passport OCR Service.

Reads passport fields from photographed identity pages for employee
onboarding: text detection through Google Cloud Vision or Tesseract,
followed by MRZ decoding with a label-matching fallback.
"""
