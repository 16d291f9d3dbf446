"""
ec2-ssh: ssh wrapper that pushes an ephemeral key through EC2 Instance Connect.
"""
__version__ = "1.0.0"
