"""
Command-line client for the settings console
"""
import argparse
import asyncio
import json
import websockets


async def save_option(uri: str, username: str, password: str, option_id: str,
                      value: str, autoload: bool):
    """Authenticate, then save one option with the nonce from the welcome message"""
    async with websockets.connect(uri) as websocket:
        welcome = json.loads(await websocket.recv())
        nonce = welcome.get("parameters", {}).get("nonce")
        print(f"Connected: {welcome.get('message')}")

        await websocket.send(json.dumps({
            "type": "auth",
            "username": username,
            "password": password
        }))
        response = json.loads(await websocket.recv())
        if response.get("type") != "auth_success":
            print(f"Authentication failed: {response.get('message')}")
            return False

        await websocket.send(json.dumps({
            "type": "command",
            "command": "update_option",
            "data": {
                "nonce": nonce,
                "option_id": option_id,
                "value": value,
                "autoload": "true" if autoload else "false"
            }
        }))
        response = json.loads(await websocket.recv())
        print(f"{response.get('type')}: {response.get('message')}")
        return response.get("type") == "option_saved"


async def list_options(uri: str, username: str, password: str):
    async with websockets.connect(uri) as websocket:
        await websocket.recv()
        await websocket.send(json.dumps({"type": "auth", "username": username, "password": password}))
        await websocket.recv()
        await websocket.send(json.dumps({"type": "command", "command": "get_options", "data": {}}))
        response = json.loads(await websocket.recv())
        for option in response.get("options", []):
            print(f"{option['id']}: {option['value']}  ({option['title']})")


def main():
    parser = argparse.ArgumentParser(description="Core settings console client")
    parser.add_argument("--uri", default="ws://localhost:8765")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default="admin123")
    parser.add_argument("--autoload", action="store_true")
    parser.add_argument("option_id", nargs="?", help="Option to save; omit to list options")
    parser.add_argument("value", nargs="?", default="true")
    args = parser.parse_args()

    try:
        if args.option_id:
            asyncio.run(save_option(args.uri, args.username, args.password,
                                    args.option_id, args.value, args.autoload))
        else:
            asyncio.run(list_options(args.uri, args.username, args.password))
    except ConnectionRefusedError:
        print("ERROR: Could not connect to the settings console.")
        print("Make sure the dashboard is running and the settings console is enabled.")


if __name__ == "__main__":
    main()
