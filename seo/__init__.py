"""
SEO helpers: page metadata and schema.org JSON-LD documents.
"""
