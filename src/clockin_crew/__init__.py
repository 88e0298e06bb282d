"""Clock-in Crew attendance package.

Organized by feature modules (profiles, attendance, team, reports) with a
thin Flask controller layer over service/repository layers.
"""
