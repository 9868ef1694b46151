"""
Assisted KYC Wizard Client
Example client that walks a session through the wizard over HTTP
"""

import requests
from typing import Optional, Dict, Any

class KYCWizardClient:
    """Client for interacting with the KYC wizard API"""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip('/')
        self.session_id: Optional[str] = None

        # Setup session for connection pooling
        self.session = requests.Session()

    def _check(self, response: requests.Response, action: str) -> Dict[str, Any]:
        if response.status_code == 200:
            return response.json()
        raise Exception(f"Failed to {action}: {response.status_code} - {response.text}")

    def _action(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.session_id:
            raise Exception("No active session. Please start a session first.")
        response = self.session.post(
            f"{self.base_url}/api/v1/session/{self.session_id}/{path}",
            json=payload or {}
        )
        return self._check(response, path)

    def start_session(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        """Start a new KYC wizard session"""
        payload = {"user_id": user_id} if user_id else {}
        data = self._check(self.session.post(f"{self.base_url}/api/v1/session/start", json=payload), "start session")
        self.session_id = data["session_id"]
        return data

    def advance(self, target_step: int) -> Dict[str, Any]:
        return self._action("advance", {"target_step": target_step})

    def select_method(self, method: str) -> Dict[str, Any]:
        return self._action("method", {"method": method})

    def enter_identifier(self, value: str) -> Dict[str, Any]:
        return self._action("identifier", {"value": value})

    def ask(self, query: str) -> Dict[str, Any]:
        return self._action("ask", {"query": query})

    def restart(self) -> Dict[str, Any]:
        return self._action("restart")

    def get_session_status(self) -> Dict[str, Any]:
        """Get current session status"""
        return self._check(
            self.session.get(f"{self.base_url}/api/v1/session/{self.session_id}/status"),
            "get session status"
        )

    def end_session(self) -> Dict[str, Any]:
        """End the current session"""
        if not self.session_id:
            return {"message": "No active session to end"}
        data = self._check(
            self.session.delete(f"{self.base_url}/api/v1/session/{self.session_id}"),
            "end session"
        )
        self.session_id = None
        return data

    def health_check(self) -> Dict[str, Any]:
        """Check API health"""
        return self._check(self.session.get(f"{self.base_url}/health"), "check health")

def show(response: Dict[str, Any]) -> None:
    screen = response["screen"]
    print(f"{screen['connectivity_badge']}  [{screen['step']}] {screen['title']}")
    print(f"   {screen['body']}")
    for speech in response.get("speech", []):
        print(f"   🔊 {speech['text']}")
    if screen.get("assistant_answer"):
        print(f"   💬 {screen['assistant_answer']}")

def aadhaar_demo(aadhaar_number: str = "123456789012"):
    """Walk one session through Aadhaar KYC and the help question screen"""
    print("🏛️  Assisted KYC Wizard - API Client Demo")
    print("=" * 50)

    client = KYCWizardClient()

    try:
        health = client.health_check()
        print(f"✅ API Status: {health['status']} ({'online' if health['online'] else 'offline'})")
        print("-" * 30)

        show(client.start_session(user_id="demo_user_001"))
        show(client.advance(1))
        show(client.select_method("aadhaar"))
        show(client.enter_identifier(aadhaar_number))
        show(client.advance(7))
        show(client.advance(6))
        show(client.advance(8))
        show(client.ask("What is KYC?"))

        status = client.get_session_status()
        print(f"📊 Method: {status['document_method']}  Number: {status['document_identifier']}")
        print(f"📋 Progress: {status['completion_step']}/8")

    except KeyboardInterrupt:
        print("\n\n🛑 Demo interrupted by user")
    except Exception as e:
        print(f"❌ Demo error: {e}")
    finally:
        if client.session_id:
            client.end_session()
            print("✅ Session ended successfully")

if __name__ == "__main__":
    aadhaar_demo()
