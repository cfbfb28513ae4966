"""
Grant portal: eligibility and verification rules engine with a FastAPI service
"""
