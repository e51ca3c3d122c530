"""Helpers for distributed training: a file-based rendezvous store and an LRU cache."""