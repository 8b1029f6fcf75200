"""
Double pendulum simulation core: dynamics, interaction, trail and viewport
mapping. Has no dependency on the windowing libraries.
"""
