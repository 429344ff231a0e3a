"""Sample RFPs, the reference company profile, and labelled benchmark cases."""
