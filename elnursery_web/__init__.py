"""HTTP surface for Elnursery"""
