"""
Example: list traffic counters of a local Xray server.

Connects to the control API on 127.0.0.1:10085 and prints every counter whose
name matches "rand" as ``name -> value``. Enable the API on the server with an
``api`` section exposing StatsService and a dokodemo-door inbound on that port.
"""
from xctl import ServiceClient


def main():
    """Query and print matching counters."""
    client = ServiceClient("127.0.0.1", 10085)

    with client:
        print("--------------------------------------------")
        stats = client.query_stats("rand", False)
        for name, value in stats.items():
            print(f"{name} -> {value}")
        print("--------------------------------------------")


if __name__ == "__main__":
    main()
