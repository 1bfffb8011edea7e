"""HTTP transport — JSON codecs, error classification, server and client."""
