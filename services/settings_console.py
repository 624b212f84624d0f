"""
Settings Console - WebSocket server for remote option changes
"""
import asyncio
import json
import websockets
from datetime import datetime
from typing import Callable, Dict, Optional, Set

from core.settings import CoreSettings, DEFAULT_CAPABILITY


class SettingsConsoleServer:
    """WebSocket server exposing the core settings save handler"""

    def __init__(self, settings: CoreSettings, host: str = "localhost", port: int = 8765,
                 users: dict = None):
        self.settings = settings
        self.host = host
        self.port = port
        self.clients: Set = set()
        self.authenticated_clients: Set = set()

        if users:
            self.access_control = users
        else:
            self.access_control = {
                "admin": {"password": "admin123", "permissions": ["read", DEFAULT_CAPABILITY]},
                "viewer": {"password": "viewer123", "permissions": ["read"]}
            }
        self.client_roles: Dict = {}
        self.on_option_saved: Optional[Callable[[str, object], None]] = None
        self.command_handlers = {
            "get_options": self.handle_get_options,
            "get_nonce": self.handle_get_nonce,
            "update_option": self.handle_update_option
        }

    async def register_client(self, websocket):
        self.clients.add(websocket)
        print(f"Client connected: {websocket.remote_address}")

    async def unregister_client(self, websocket):
        self.clients.discard(websocket)
        self.authenticated_clients.discard(websocket)
        self.client_roles.pop(websocket, None)
        print(f"Client disconnected: {websocket.remote_address}")

    def permissions(self, websocket) -> list:
        """Permissions of the user behind an authenticated connection"""
        if websocket not in self.authenticated_clients:
            return []
        role = self.client_roles.get(websocket, "")
        return list(self.access_control.get(role, {}).get("permissions", []))

    async def authenticate(self, websocket, message: Dict) -> bool:
        username = message.get("username", "")
        password = message.get("password", "")

        user = self.access_control.get(username)
        if user and user["password"] == password:
            self.authenticated_clients.add(websocket)
            self.client_roles[websocket] = username
            await websocket.send(json.dumps({
                "type": "auth_success",
                "role": username,
                "permissions": user["permissions"]
            }))
            return True

        await websocket.send(json.dumps({
            "type": "auth_failure",
            "message": "Invalid credentials"
        }))
        return False

    async def handle_get_options(self, websocket, data: Dict) -> Dict:
        return {
            "type": "options",
            "options": self.settings.page()
        }

    async def handle_get_nonce(self, websocket, data: Dict) -> Dict:
        return {
            "type": "nonce",
            "nonce": self.settings.nonce()
        }

    async def handle_update_option(self, websocket, data: Dict) -> Dict:
        """Validate and save one option on behalf of the connected user"""
        result = self.settings.save_option(data, self.permissions(websocket))
        if not result.success:
            return {"type": "error", "message": result.message}

        option_id = data.get("option_id")
        value = data.get("value")
        username = self.client_roles.get(websocket, "Unknown")
        print(f"[{datetime.now().strftime('%H:%M:%S')}] User '{username}' set {option_id} = {value}")

        if self.on_option_saved:
            try:
                self.on_option_saved(option_id, value)
            except Exception as e:
                print(f"Error notifying option change: {e}")

        return {
            "type": "option_saved",
            "message": result.message,
            "option_id": option_id,
            "value": value
        }

    async def handle_command(self, websocket, message: Dict):
        if websocket not in self.authenticated_clients:
            await websocket.send(json.dumps({
                "type": "error",
                "message": "Not authenticated"
            }))
            return

        command = message.get("command", "")
        data = message.get("data") or {}
        if not isinstance(data, dict):
            await websocket.send(json.dumps({
                "type": "error",
                "message": "Invalid message"
            }))
            return

        handler = self.command_handlers.get(command)
        if handler is None:
            await websocket.send(json.dumps({
                "type": "error",
                "message": f"Unknown command: {command}"
            }))
            return

        try:
            result = await handler(websocket, data)
            await websocket.send(json.dumps(result))
        except Exception as e:
            await websocket.send(json.dumps({
                "type": "error",
                "message": str(e)
            }))

    async def handle_message(self, websocket, raw: str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            await websocket.send(json.dumps({
                "type": "error",
                "message": "Invalid JSON"
            }))
            return

        if not isinstance(data, dict):
            await websocket.send(json.dumps({
                "type": "error",
                "message": "Invalid message"
            }))
            return

        msg_type = data.get("type", "")
        if msg_type == "auth":
            await self.authenticate(websocket, data)
        elif msg_type == "command":
            await self.handle_command(websocket, data)
        else:
            await websocket.send(json.dumps({
                "type": "error",
                "message": f"Unknown message type: {msg_type}"
            }))

    async def handle_client(self, websocket, path: str = None):
        await self.register_client(websocket)
        try:
            await websocket.send(json.dumps({
                "type": "welcome",
                "message": "Connected to Core Settings Console",
                "parameters": self.settings.parameters()
            }))

            async for message in websocket:
                await self.handle_message(websocket, message)
        except websockets.exceptions.ConnectionClosed:
            pass
        except Exception as e:
            print(f"Error handling client: {e}")
        finally:
            await self.unregister_client(websocket)

    async def start(self):
        """Start the WebSocket server"""
        print(f"Settings Console Server starting on ws://{self.host}:{self.port}")
        async with websockets.serve(
            self.handle_client,
            self.host,
            self.port,
            ping_interval=20,
            ping_timeout=10
        ):
            print(f"Settings Console Server running on ws://{self.host}:{self.port}")
            await asyncio.Future()

    def run(self):
        """Run the server (blocking)"""
        asyncio.run(self.start())


def main():
    """Standalone server with options stored beside the working directory"""
    import sys
    from core.settings import NonceManager, OptionStore

    port = int(sys.argv[1]) if len(sys.argv) > 1 else 8765
    settings = CoreSettings(OptionStore("options.json"), NonceManager("change-me"))
    server = SettingsConsoleServer(settings, host="localhost", port=port)
    print(f"Starting standalone Settings Console Server on ws://localhost:{port}")
    server.run()


if __name__ == "__main__":
    main()
