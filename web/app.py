"""Flask web application for vehicle maintenance tracking."""

import math
import os
from datetime import date
from pathlib import Path

from flask import Flask, render_template, request, redirect, url_for, flash

from upkeep import (
    InvalidInput,
    Status,
    StorageError,
    append_service_record,
    compute_due_items,
    get_task,
    latest_by_key,
    load_snapshot,
    sort_history,
    write_current_distance,
)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
app.config["VEHICLE_FILE"] = os.environ.get(
    "UPKEEP_VEHICLE_FILE", str(Path(__file__).parent.parent / "vehicle.yaml")
)


def vehicle_file() -> Path:
    return Path(app.config["VEHICLE_FILE"])


def format_distance(distance):
    """Format distance with comma separator."""
    if distance is None:
        return "—"
    return f"{distance:,.0f}"


def format_days(days):
    """Format remaining days; overdue shows as negative."""
    if days is None:
        return "—"
    return f"{days:,d}d"


def status_color(status: Status) -> str:
    """Get Tailwind color classes for status."""
    colors = {
        Status.OVERDUE: "bg-red-100 text-red-800 border-red-200",
        Status.DUE_SOON: "bg-yellow-100 text-yellow-800 border-yellow-200",
        Status.OK: "bg-green-100 text-green-800 border-green-200",
    }
    return colors.get(status, "bg-gray-100 text-gray-800")


def status_badge_color(status: Status) -> str:
    """Get Tailwind color classes for status badge."""
    colors = {
        Status.OVERDUE: "bg-red-500 text-white",
        Status.DUE_SOON: "bg-yellow-500 text-white",
        Status.OK: "bg-green-500 text-white",
    }
    return colors.get(status, "bg-gray-500 text-white")


# Register template filters
app.jinja_env.filters["format_distance"] = format_distance
app.jinja_env.filters["format_days"] = format_days
app.jinja_env.filters["status_color"] = status_color
app.jinja_env.filters["status_badge_color"] = status_badge_color


@app.route("/")
def index():
    """Dashboard: odometer and ranked task status."""
    try:
        snapshot = load_snapshot(vehicle_file())
        current = snapshot.current_distance
        items = compute_due_items(
            current if current is not None else 0,
            date.today(),
            snapshot.records,
            catalog=snapshot.catalog,
        )
    except (InvalidInput, StorageError) as e:
        app.logger.error("Cannot compute status for %s: %s", vehicle_file(), e)
        return render_template("error.html", message=str(e)), 500

    status_counts = {
        "overdue": sum(1 for i in items if i.status == Status.OVERDUE),
        "due_soon": sum(1 for i in items if i.status == Status.DUE_SOON),
        "ok": sum(1 for i in items if i.status == Status.OK),
    }

    return render_template(
        "index.html",
        snapshot=snapshot,
        items=items,
        last_by_key=latest_by_key(snapshot.records),
        status_counts=status_counts,
    )


@app.route("/distance", methods=["POST"])
def update_distance():
    """Handle odometer form submission."""
    value = request.form.get("distance", "").replace(",", "").strip()
    if not value:
        flash("Please enter a distance", "error")
        return redirect(url_for("index"))

    try:
        distance = float(value)
    except ValueError:
        distance = math.nan
    if not math.isfinite(distance) or distance < 0:
        flash("Invalid distance value", "error")
        return redirect(url_for("index"))

    try:
        write_current_distance(vehicle_file(), distance)
    except StorageError as e:
        flash(str(e), "error")
        return redirect(url_for("index"))

    flash(f"Updated distance to {distance:,.0f}", "success")
    return redirect(url_for("index"))


@app.route("/log/<task_key>", methods=["POST"])
def log_now(task_key: str):
    """Log a task as done today at the stored odometer reading."""
    try:
        snapshot = load_snapshot(vehicle_file())
    except StorageError as e:
        flash(str(e), "error")
        return redirect(url_for("index"))

    task = get_task(snapshot.catalog, task_key)
    if task is None:
        flash(f"Unknown task '{task_key}'", "error")
        return redirect(url_for("index"))

    if snapshot.current_distance is None:
        flash("Set the current distance before logging a service", "error")
        return redirect(url_for("index"))

    try:
        append_service_record(vehicle_file(), task.key, snapshot.current_distance)
    except StorageError as e:
        flash(str(e), "error")
        return redirect(url_for("index"))

    flash(f"Logged {task.display_name}", "success")
    return redirect(url_for("index"))


@app.route("/history")
def history():
    """Service history, newest first."""
    try:
        snapshot = load_snapshot(vehicle_file())
        records = sort_history(snapshot.records)
    except (InvalidInput, StorageError) as e:
        app.logger.error("Cannot read history for %s: %s", vehicle_file(), e)
        return render_template("error.html", message=str(e)), 500

    titles = {}
    for record in records:
        task = get_task(snapshot.catalog, record.key)
        titles[record.key] = task.display_name if task else record.key

    return render_template(
        "history.html", snapshot=snapshot, records=records, titles=titles
    )


if __name__ == "__main__":
    # 5001 avoids the macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
