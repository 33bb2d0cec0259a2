"""Test Case Ace package"""
