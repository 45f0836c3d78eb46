"""
Server Diagnostic Script

Walks a running server through the full profile flow and reports
status codes and response times for each step.

Usage:
    python scripts/debug_server.py
    python scripts/debug_server.py --base-url http://localhost:8000
    python scripts/debug_server.py --recipient me@example.com --full  # also check resubmission and 404 paths
"""

import argparse
import time
import httpx

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
DEFAULT_RECIPIENT = "diagnostics@example.com"


def timed_request(client: httpx.Client, method: str, url: str, **kwargs) -> tuple[httpx.Response | None, float, str | None]:
    """Make a request and return (response, elapsed_seconds, error)."""
    start = time.time()
    try:
        response = getattr(client, method)(url, **kwargs)
        elapsed = time.time() - start
        return response, elapsed, None
    except httpx.TimeoutException as e:
        elapsed = time.time() - start
        return None, elapsed, f"TIMEOUT after {elapsed:.1f}s: {e}"
    except httpx.ConnectError as e:
        elapsed = time.time() - start
        return None, elapsed, f"CONNECTION ERROR: {e}"
    except Exception as e:
        elapsed = time.time() - start
        return None, elapsed, f"ERROR: {e}"


def print_result(label: str, response: httpx.Response | None, elapsed: float, error: str | None, expected: int = 200):
    """Print formatted test result."""
    if error:
        print(f"  {'FAIL':<6} {label:<40} {elapsed:>7.2f}s  {error}")
        return
    status = response.status_code
    status_icon = "OK" if status == expected else "FAIL"
    print(f"  {status_icon:<6} {label:<40} {elapsed:>7.2f}s  HTTP {status} (expected {expected})")
    if status != expected:
        print(f"         Response: {response.text[:500]}")


def run_diagnostics(base_url: str, recipient: str, run_full: bool):
    """Run all diagnostic steps."""
    base_url = base_url.rstrip("/")

    print(f"\n{'='*70}")
    print(f"  SERVER DIAGNOSTICS: {base_url}")
    print(f"{'='*70}")

    client = httpx.Client(timeout=30.0)

    # --- Phase 1: Basic connectivity ---
    print("\n--- Phase 1: Basic Connectivity ---\n")
    resp, elapsed, err = timed_request(client, "get", f"{base_url}/ping")
    print_result("/ping", resp, elapsed, err)
    if err:
        print("\n  ** Server is not responding. Is uvicorn running?")
        client.close()
        return

    resp, elapsed, err = timed_request(client, "get", f"{base_url}/health")
    print_result("/health", resp, elapsed, err)

    # --- Phase 2: Issue a link ---
    print("\n--- Phase 2: Issue Link ---\n")
    resp, elapsed, err = timed_request(client, "post", f"{base_url}/send-upload-link", json={})
    print_result("/send-upload-link (no recipient)", resp, elapsed, err, expected=400)

    resp, elapsed, err = timed_request(
        client, "post", f"{base_url}/send-upload-link",
        json={"recipientEmail": recipient, "senderName": "Diagnostics"},
    )
    print_result("/send-upload-link", resp, elapsed, err)
    if err or resp.status_code != 200:
        print("\n  ** Could not issue a token (check EMAIL_* settings).")
        client.close()
        return
    token = resp.json()["token"]

    resp, elapsed, err = timed_request(client, "get", f"{base_url}/status/{token}")
    print_result("/status/{token}", resp, elapsed, err)

    resp, elapsed, err = timed_request(client, "get", f"{base_url}/profile/{token}")
    print_result("/profile/{token}", resp, elapsed, err)

    # --- Phase 3: Submit ---
    print("\n--- Phase 3: Submit Profile ---\n")
    submission = {
        "token": token,
        "recipientEmail": recipient,
        "fullName": "Diagnostics User",
        "companyStatus": "yes",
        "currentRole": "Engineer",
        "companyName": "Example Corp",
        "experienceYears": "3",
    }
    resp, elapsed, err = timed_request(
        client, "post", f"{base_url}/api/update-profile", json={**submission, "fullName": ""},
    )
    print_result("/api/update-profile (no name)", resp, elapsed, err, expected=400)

    resp, elapsed, err = timed_request(client, "post", f"{base_url}/api/update-profile", json=submission)
    print_result("/api/update-profile", resp, elapsed, err)
    profile_id = resp.json().get("profileId") if resp is not None and resp.status_code == 200 else None

    resp, elapsed, err = timed_request(client, "get", f"{base_url}/api/profiles")
    print_result("/api/profiles", resp, elapsed, err)

    if profile_id:
        resp, elapsed, err = timed_request(client, "get", f"{base_url}/api/profiles/{profile_id}")
        print_result("/api/profiles/{id}", resp, elapsed, err)

    # --- Phase 4: Resubmission and negative paths (optional) ---
    if run_full:
        print("\n--- Phase 4: Resubmission ---\n")
        resp, elapsed, err = timed_request(
            client, "post", f"{base_url}/api/update-profile",
            json={**submission, "companyStatus": "no"},
        )
        print_result("/api/update-profile (resubmit)", resp, elapsed, err)
        if resp is not None and profile_id and resp.status_code == 200:
            same = resp.json().get("profileId") == profile_id
            print(f"         Same profile updated: {same}")

        resp, elapsed, err = timed_request(client, "get", f"{base_url}/profile/never-issued-{int(time.time())}")
        print_result("/profile/{unknown}", resp, elapsed, err, expected=404)

    client.close()
    print(f"\n{'='*70}\n")


def main():
    parser = argparse.ArgumentParser(description="Profile Collection server diagnostics")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help=f"Server URL (default: {DEFAULT_BASE_URL})")
    parser.add_argument("--recipient", default=DEFAULT_RECIPIENT, help="Recipient email for the test link")
    parser.add_argument("--full", action="store_true", help="Also check resubmission and 404 paths")
    args = parser.parse_args()

    run_diagnostics(args.base_url, args.recipient, args.full)


if __name__ == "__main__":
    main()
