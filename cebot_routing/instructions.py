"""
Turns a RoutePlan into the text shown to the traveller.

Output depends only on the plan's fields, so the same plan always renders the
same text.
"""
from .route_plan import DIRECT, MULTI_RIDE, NO_ROUTE

BIDIRECTIONAL_NOTE = "✅ Note: This route works in BOTH directions!"
BIDIRECTIONAL_NOTE_MULTIPLE = "✅ Note: All these routes work in BOTH directions!"


def format_plan(plan):
    if plan.type == DIRECT:
        if len(plan.routes) == 1:
            return format_direct_route(plan)
        return format_direct_routes(plan)
    if plan.type == MULTI_RIDE:
        return format_multi_ride(plan)
    if plan.type == NO_ROUTE:
        return format_no_route(plan)
    return format_error(plan)


def format_direct_route(plan):
    route = plan.routes[0]
    return (
        "🚌 DIRECT ROUTE AVAILABLE 🚌\n\n"
        f"Take {route.code} ({route.mode}) from {plan.origin} to {plan.destination}.\n"
        f"📍 Route: {route.origin} ↔ {route.destination}\n\n"
        f"{BIDIRECTIONAL_NOTE}"
    )


def format_direct_routes(plan):
    lines = [
        "🚌 MULTIPLE DIRECT ROUTES AVAILABLE 🚌",
        "",
        f"From {plan.origin} to {plan.destination}:",
        "",
    ]
    for index, route in enumerate(plan.routes, start=1):
        lines.append(f"Option {index}: {route.code} ({route.mode})")
        lines.append(f"   Route: {route.origin} ↔ {route.destination}")
        if route.notes:
            lines.append(f"   💡 {route.notes}")
        lines.append("")
    lines.append(BIDIRECTIONAL_NOTE_MULTIPLE)
    return "\n".join(lines)


def format_multi_ride(plan):
    # Boarding point of each ride: the origin, then every transfer point
    boarding = [plan.origin] + list(plan.transfer_points)
    alighting = list(plan.transfer_points) + [plan.destination]
    transfers = plan.transfers
    rides = len(plan.routes)

    title = "MULTI-RIDE JOURNEY PLAN" if transfers == 1 else "COMPLEX MULTI-RIDE JOURNEY PLAN"
    lines = [f"🚌 {title} 🚌", "", f"From {plan.origin} to {plan.destination}:", ""]
    for step, route in enumerate(plan.routes, start=1):
        verb = "Take" if step == 1 else "Transfer to"
        lines.append(f"Step {step}: {verb} {route.code} ({route.mode})")
        lines.append(f"   • Board at: {boarding[step - 1]}")
        lines.append(f"   • Get off at: {alighting[step - 1]}")
        lines.append("")

    label = "Transfer Point" if transfers == 1 else "Transfer Points"
    lines.append(f"📍 {label}: {', '.join(plan.transfer_points)}")
    lines.append(f"🎯 Total Rides: {rides} ({transfers} transfer{'s' if transfers != 1 else ''})")
    lines.append("")
    if transfers == 1:
        lines.append("💡 Tip: Keep an eye out for the route codes displayed on the front of each jeepney!")
    else:
        lines.append("💡 Tip: Allow extra time for transfers on longer journeys.")
    return "\n".join(lines)


def format_no_route(plan):
    text = (
        f"Sorry, I couldn't find a route from {plan.origin} to {plan.destination}. "
        "Try breaking your journey or ask for routes to nearby landmarks."
    )
    suggestions = plan.suggestions or {}
    origins = suggestions.get("similar_origins") or []
    destinations = suggestions.get("similar_destinations") or []
    if origins:
        text += "\n\nRoutes starting near similar places: " + ", ".join(
            f"{s['code']} ({s['location']})" for s in origins)
    if destinations:
        text += "\n\nRoutes ending near similar places: " + ", ".join(
            f"{s['code']} ({s['location']})" for s in destinations)
    return text


def format_error(plan):
    return "Sorry, I encountered an error while planning your route. Please try again."
