from app.ballot_auth.utils import create_access_token
import sys

def run_command():
    method = sys.argv[1] if len(sys.argv) > 1 else None
    methods = {
        "issue_token": issue_token,
    }
    if method not in methods:
        print(f"Unknown method: {method}. Available methods: {', '.join(methods.keys())}")
        return

    methods[method](*sys.argv[2:])

def issue_token(address: str):
    print(create_access_token(address))

if __name__ == "__main__":
    run_command()
