"""
WebRTC signaling and robot-control broker package.

This service is responsible for:
- Pairing one viewer (operator console) with one streamer (robot) over WebSockets.
- Relaying WebRTC offer/answer/ICE messages and robot commands between them.
- Caching robot status and a bounded history of issued commands.

The HTTP/WebSocket server is implemented with Tornado.
"""
