#!/usr/bin/env python3
"""
Example: Receive and print mocopi motion capture datagrams.

This script listens for the UDP stream sent by a mocopi device (or the
mocopi app forwarding it), decodes every datagram and prints the result.
Malformed datagrams are reported and dropped.

Usage:
    python receive_mocopi.py --port 12351
    python receive_mocopi.py --port 12351 --verbose
    python receive_mocopi.py --port 12351 --fk
"""

import argparse
import os
import socket
import sys
import time

# Allow running without installing the package (add project root to path)
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from mocopi_sdk_python import (
    DecodeError,
    SkeletonPacket,
    compute_forward_kinematics,
    decode,
)


def print_skeleton(packet, verbose):
    bones = packet.skeleton.bones
    print(f"\n[Skeleton] format={packet.head.format} ver={packet.head.ver} "
          f"sender port={packet.info.port} bones={len(bones)}")
    if verbose:
        for bone in bones:
            pos = bone.transform.position
            print(f"  [{bone.id:2d}] parent={bone.parent:2d} "
                  f"pos=({pos.x:7.3f}, {pos.y:7.3f}, {pos.z:7.3f})")


def print_frame(packet, verbose, skeleton=None, fk=False):
    frame = packet.frame
    print(f"[Frame {frame.num}] time={frame.time} bones={len(frame.bones)}")
    if verbose:
        for bone in frame.bones:
            rot = bone.transform.rotation
            pos = bone.transform.position
            print(f"  [{bone.id:2d}] pos=({pos.x:7.3f}, {pos.y:7.3f}, {pos.z:7.3f}) "
                  f"rot=({rot.w:6.3f}, {rot.x:6.3f}, {rot.y:6.3f}, {rot.z:6.3f})")
    if fk and skeleton is not None:
        pose = compute_forward_kinematics(skeleton, frame)
        for bone_id in sorted(pose):
            gp = pose[bone_id][0]
            print(f"  global [{bone_id:2d}] ({gp[0]:7.3f}, {gp[1]:7.3f}, {gp[2]:7.3f})")


def main():
    parser = argparse.ArgumentParser(description="Receive and print mocopi datagrams")

    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Address to bind (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=12351,
        help="UDP port to listen on (default: 12351)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print per-bone transforms",
    )

    parser.add_argument(
        "--fk",
        action="store_true",
        default=False,
        help="Print global bone positions once a skeleton has been received",
    )

    parser.add_argument(
        "--print_rate",
        action="store_true",
        default=False,
        help="Print receive rate statistics",
    )

    args = parser.parse_args()

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, 8 * 1024 * 1024)
    except OSError:
        pass
    sock.bind((args.host, args.port))
    sock.settimeout(0.5)
    print(f"[Receiver] Listening on UDP port {args.port}")
    print("[Main] Press Ctrl+C to stop")

    skeleton = None
    recv_count = 0
    error_count = 0
    rate_start_time = time.time()
    rate_display_interval = 2.0

    try:
        while True:
            try:
                data, _addr = sock.recvfrom(65535)
            except socket.timeout:
                continue

            try:
                packet = decode(data)
            except DecodeError as e:
                error_count += 1
                print(f"[Receiver] Decode error, dropping datagram: {e}")
                continue

            if isinstance(packet, SkeletonPacket):
                skeleton = packet.skeleton
                print_skeleton(packet, args.verbose)
            else:
                print_frame(packet, args.verbose, skeleton, args.fk)

            recv_count += 1
            if args.print_rate:
                now = time.time()
                dt = now - rate_start_time
                if dt >= rate_display_interval:
                    print(f"[Main] Receive rate: {recv_count / dt:.1f} Hz, "
                          f"dropped: {error_count}")
                    recv_count = 0
                    error_count = 0
                    rate_start_time = now

    except KeyboardInterrupt:
        print("\n[Main] Stopping...")
    finally:
        sock.close()
        print("[Main] Done")


if __name__ == "__main__":
    main()
