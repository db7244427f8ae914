"""Service layer for dashboard pages"""
