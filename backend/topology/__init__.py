"""
Region topology core: regions, availability zones and cascading deactivation.
"""
