#!/usr/bin/env python3
"""
Quick smoke test against a running Corprex Scheduler API.
Run the server first: uvicorn app.main:app --reload

Books a real slot three weekdays out and cancels it again.
"""

from datetime import date, timedelta

import httpx

BASE_URL = "http://127.0.0.1:8000/api"


def _next_weekday(start: date) -> date:
    while start.weekday() >= 5:
        start += timedelta(days=1)
    return start


def test_api():
    print("Testing Corprex Scheduler API...\n")

    with httpx.Client(base_url=BASE_URL, timeout=30) as client:
        # Test 1: Health
        print("1. Testing health check...")
        response = client.get("/health")
        print(f"   Status: {response.status_code}")
        print(f"   Response: {response.json()}\n")

        # Test 2: Available dates this month
        today = date.today()
        print("2. Testing available dates...")
        response = client.get("/availability/dates", params={"year": today.year, "month": today.month})
        dates = response.json()["availableDates"]
        print(f"   {len(dates)} dates available, first few: {dates[:5]}\n")

        # Test 3: Available times
        day = _next_weekday(today + timedelta(days=3))
        print(f"3. Testing available times for {day.isoformat()}...")
        response = client.get("/availability/times", params={"date": day.isoformat()})
        times = response.json()["availableTimes"]
        print(f"   Times: {times}\n")
        if not times:
            print("   No open times, skipping booking.")
            return

        # Test 4: Book the first open time
        print(f"4. Booking {day.isoformat()} at {times[0]}...")
        response = client.post(
            "/meetings/book",
            json={
                "firstName": "Test",
                "lastName": "User",
                "email": "test@example.com",
                "phone": "555-1234",
                "company": "Test Company",
                "message": "This is a test booking",
                "date": day.isoformat(),
                "time": times[0],
                "timezone": "America/New_York",
            },
        )
        data = response.json()
        print(f"   Status: {response.status_code}")
        print(f"   Response: {data}\n")
        if response.status_code != 200:
            return

        # Test 5: Same slot again should conflict
        print("5. Booking the same slot again (expect 409)...")
        response = client.post(
            "/meetings/book",
            json={
                "firstName": "Second",
                "lastName": "User",
                "email": "second@example.com",
                "company": "Test Company",
                "date": day.isoformat(),
                "time": times[0],
                "timezone": "America/New_York",
            },
        )
        print(f"   Status: {response.status_code} {response.json()}\n")

        # Test 6: Cancel
        print("6. Cancelling the booking...")
        response = client.post(f"/meetings/{data['meetingId']}/cancel")
        print(f"   Status: {response.status_code} {response.json()}\n")

        # Test 7: List meetings
        print("7. Testing meetings endpoint...")
        response = client.get("/meetings")
        print(f"   Status: {response.status_code}")
        print(f"   Meetings: {len(response.json().get('meetings', []))} found\n")

    print("✅ All API tests completed!")


if __name__ == "__main__":
    try:
        test_api()
    except httpx.ConnectError:
        print("❌ Error: Could not connect to server.")
        print("Please start the server first:")
        print("  uvicorn app.main:app --reload")
