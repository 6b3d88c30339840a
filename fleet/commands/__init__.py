"""Fleet CLI commands"""
