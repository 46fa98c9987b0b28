import os
import sys

import requests


BASE = os.environ.get("REPORTDESK_BASE_URL", "http://127.0.0.1:8000")
ADMIN_EMAIL = os.environ.get("REPORTDESK_ADMIN_EMAIL", "admin@servihub.com")


def main() -> int:
    s = requests.Session()
    # 1) health
    r = s.get(f"{BASE}/health", timeout=5)
    print("health:", r.status_code, r.text)

    # 2) login (cookie kept by the session)
    r = s.post(f"{BASE}/login", json={"email": ADMIN_EMAIL}, timeout=10)
    print("login:", r.status_code, r.text)
    if r.status_code != 202:
        return 1

    r = s.get(f"{BASE}/auth", timeout=10)
    print("auth:", r.status_code, r.text)

    # 3) submit
    r = s.post(f"{BASE}/reports", json={"type": "review", "target_id": 101, "reason": "Spam content"}, timeout=10)
    print("submit:", r.status_code, r.text[:200])
    if r.status_code != 201:
        return 1
    report_id = r.json()["data"]["id"]

    # 4) list unresolved reviews
    r = s.get(f"{BASE}/reports", params={"status": "unresolved", "type": "review"}, timeout=10)
    print("list:", r.status_code, r.json().get("pagination"))

    # 5) resolve
    r = s.put(f"{BASE}/reports", json={"id": report_id}, timeout=10)
    print("resolve:", r.status_code, r.text[:200])

    # 6) logout
    r = s.post(f"{BASE}/logout", timeout=10)
    print("logout:", r.status_code, r.text)
    r = s.get(f"{BASE}/auth", timeout=10)
    print("auth after logout:", r.status_code, r.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
