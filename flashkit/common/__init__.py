"""Shared enumerations, array comparison, a thread pool and binary serialization."""