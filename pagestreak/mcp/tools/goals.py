from pagestreak.mcp.client import PagestreakClient, is_error


async def reading_goal(client: PagestreakClient) -> dict:
    profile = await client.get("/api/profile")
    if is_error(profile):
        return profile
    today = await client.get("/api/stats/today")
    history = await client.get("/api/profile/progress")
    goal = profile["goal"]
    return {
        "daily_goal_minutes": goal["current_rate_minutes_per_day"],
        "end_goal_minutes": goal["end_rate_goal_minutes_per_day"],
        "end_goal_date": goal["end_rate_goal_date"],
        "read_today": today.get("minutes", 0),
        "goal_met_today": today.get("goal_met", False),
        "latest_checkpoint": history[0] if not is_error(history) and history else None,
    }


async def weekly_summary(client: PagestreakClient, week_start: str | None = None) -> dict:
    params = {"week_start": week_start} if week_start else {}
    return await client.get("/api/stats/weekly", params=params)
