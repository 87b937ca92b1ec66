"""Extra volume propagation and Ceph backend settings."""