"""Recipe Planner web API."""
