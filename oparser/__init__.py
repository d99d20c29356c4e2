"""
oparser: L3VPN overlay configuration extractor for IOS-XR MPLS-PE routers.

Takes a router configuration exported in formal format and a Bundle-Ether
interface (a whole bundle or one sub-interface), and pulls out everything
needed to move that interface's overlay to another router.

Main features:
- Interface/VRF pair selection for a bundle or sub-interface
- Heuristic policy-map and route-policy resolution
- Per-category artifacts (vrf, interface, bgp, static, hsrp, policies)
- Diagnostics for every entry that did not resolve
- Apply and removal ordering in the run manifest
"""

__version__ = "0.1.0"
