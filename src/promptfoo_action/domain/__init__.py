"""Domain models and pure decision logic"""
