"""Adapters for git, GitHub, the filesystem and the promptfoo CLI"""
