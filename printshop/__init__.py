"""Kids 3D print store backend"""
