"""FolderSync Client - Version"""

VERSION = "1.0.0"
