"""Outpass System package.

Student outpass (leave) requests routed through mentor and warden approval.
Organized by feature modules with a thin Flask controller layer over
service/repository layers.
"""
