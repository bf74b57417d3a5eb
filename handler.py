"""
AWS Lambda entry point — serves the Decision Compass API through Mangum.

Sessions live in the warm container's memory, so a cold start begins empty.
"""

from mangum import Mangum

from app.main import app

handler = Mangum(app, lifespan="off")
