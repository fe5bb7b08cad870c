"""Item and Secret models"""
