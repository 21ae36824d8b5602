"""Records application for the SJMC backend.

This package contains the record file models, the generic record store,
the stats aggregator, the response cache and the API views exposing
them to the front-end application.
"""
